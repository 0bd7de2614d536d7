# Supabase table: groups
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

groups (one membership row per (user, group) pair; a group has no other record):
- id: bigint (primary key, identity)
- user_id: uuid (foreign key to users.user_id, not null)
- user_group_id: uuid (not null) - shared by every member of the group, generated on create
- group_name: text (not null) - copied from the admin's row when joining
- role: text (not null) - values: admin, member
- unique constraint on (user_id, user_group_id)
- unique constraint on (user_id) - one active group per user

The service checks both constraints before inserting; the unique indexes
catch concurrent requests that race past those checks.
"""

ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"
