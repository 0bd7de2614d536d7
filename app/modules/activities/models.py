# Supabase table: activities
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

activities:
- activity_id: uuid (primary key, default: gen_random_uuid())
- activity_owner_id: uuid (foreign key to users.user_id, not null)
- name: text (not null)
- activity_link: text (nullable)
- activity_date: timestamptz (not null)
- activity_location: text (nullable)

Activities are not keyed by group; they belong to the group of their owner.
"""
