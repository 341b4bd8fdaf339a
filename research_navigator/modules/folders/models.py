# Supabase table: folders ("tagged pages" in the UI)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

folders:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to auth.users.id, not null)
- name: text (not null)
- description: text (not null, default: '')
- created_at: timestamp (default: now())

Folders do not nest and have no relation to search_history.
Row-level security restricts every operation to user_id = auth.uid().
"""
