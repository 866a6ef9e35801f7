# Supabase table: admin_users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

admin_users:
- id: uuid (primary key, = auth.users.id)
- email: text (nullable)
- created_at: timestamp (default: now())

Admin analytics read every user's rows, so the service uses the service_role
client (SUPABASE_SERVICE_ROLE_KEY), which bypasses RLS.
"""
