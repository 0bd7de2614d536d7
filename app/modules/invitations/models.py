# Supabase table: invitations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

invitations:
- invitation_id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to users.user_id, not null) - the invitee
- user_group_id: uuid (nullable) - group the invitation asks the invitee to join
- activity_id: uuid (foreign key to activities.activity_id, nullable)
  - null: group-join invitation
  - set: invitation to an activity; accepting it lists the activity as accepted
- accept: boolean (not null, default: false)
- decline: boolean (not null, default: false)
- check constraint: not (accept and decline)

Pending means accept = false and decline = false. Answering sets exactly one of them.
"""
