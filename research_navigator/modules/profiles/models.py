# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (unique, foreign key to auth.users.id, not null)
- name: text (not null, default: '')
- dob: date (nullable)
- currently_pursuing: text (not null, default: '')
- interests: text[] (not null, default: '{}')
- phone: text (not null, default: '')
- created_at: timestamp (default: now())

Row-level security: a user may select, insert and update only the row whose
user_id equals auth.uid(). One profile per user.
"""
