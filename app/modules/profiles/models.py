# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, = auth.users.id)
- email: text (nullable)
- full_name: text (nullable)
- bio: text (nullable)
- avatar_url: text (nullable)
- mood_colors: jsonb (nullable) - {"sad": "#hex", "mid": "#hex", "amazing": "#hex"}
- onboarding_completed: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

RLS: users can select/insert/update only the row where id = auth.uid()
"""
