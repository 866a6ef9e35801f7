# Supabase tables: assessment_results, health_data
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

assessment_results:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- answers: jsonb (not null) - [{"id": "Q1", "choice": "C"}, ...]
- score: integer (0-30)
- category: text (not null)
- ai_insights: jsonb - {"insights": [...], "recommendations": [...]}
- created_at: timestamp (default: now())

health_data:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- answers: jsonb (not null) - seven free-text answers
- report: jsonb (not null) - AI generated psychological report
- created_at: timestamp (default: now())

RLS: users can only select/insert rows where user_id = auth.uid()
"""
