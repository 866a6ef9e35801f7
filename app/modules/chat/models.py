# Supabase tables: chat_sessions, chat_messages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

chat_sessions:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- created_at: timestamp (default: now())

chat_messages:
- id: uuid (primary key)
- session_id: uuid (foreign key to chat_sessions.id, not null)
- user_id: uuid (foreign key to auth.users.id, not null)
- message: text (not null)
- is_bot: boolean (not null)
- created_at: timestamp (default: now())

One session per user per day; the last 10 messages of it are replayed to the model.
"""
