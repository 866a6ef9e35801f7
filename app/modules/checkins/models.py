# Supabase table: daily_checkins
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

daily_checkins:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- checkin_date: date (not null)
- mood: text (not null) - excited, happy, calm, neutral, tired, stressed, sad,
  anxious, frustrated, overwhelmed
- energy_level: integer (1-10)
- sleep_quality: integer (1-10)
- stress_level: integer (1-10)
- physical_activity: text (nullable)
- social_interactions: text (nullable)
- emotions: text[] (nullable)
- daily_goals_progress: text (nullable)
- productivity_rating: integer (1-10, nullable)
- weather_impact: text (nullable)
- gratitude: text (nullable)
- notes: text (nullable)
- challenges_faced: text (nullable)
- wins_celebrated: text (nullable)
- motivation_level: integer (1-10, nullable)
- focus_level: integer (1-10, nullable)
- overall_satisfaction: integer (1-10, nullable)
- created_at: timestamp (default: now())
- unique constraint on (user_id, checkin_date)

RLS: users can select/insert/update only rows where user_id = auth.uid()
"""
