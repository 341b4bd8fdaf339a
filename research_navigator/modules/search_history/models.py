# Supabase table: search_history
# Rows are append-only; no update or delete is exposed.

"""
Expected Supabase table structure:

search_history:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to auth.users.id, not null)
- query: text (not null)
- filters: jsonb (not null, default: '{}') - string -> string
- created_at: timestamp (default: now())
"""
