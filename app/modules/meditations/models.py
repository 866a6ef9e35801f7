# Supabase table: meditations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

meditations:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- type: text (not null, default: 'mindfulness')
- duration: integer (seconds, > 0)
- created_at: timestamp (default: now())

RLS: users can only select/insert/delete rows where user_id = auth.uid()
"""
