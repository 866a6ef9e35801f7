# Supabase table: journals
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

journals:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- content: text (not null)
- mood: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

RLS: users can only select/insert/update/delete rows where user_id = auth.uid()
"""
