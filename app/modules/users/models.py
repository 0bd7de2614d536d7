# Supabase table: users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- user_id: uuid (primary key, references auth.users.id)
- name: text (not null) - full name from the OAuth profile, else the email local part
- email: text (unique, not null)

A row is created the first time a session is synced and is never updated
afterwards by this service.
"""
