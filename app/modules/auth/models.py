# Supabase Auth
# Sign-in is delegated to Supabase Auth with Google as the OAuth provider.
# No custom tables are required for authentication itself.

"""
Supabase Auth provides:
- auth.sign_in_with_oauth() - Start Google sign-in (calendar scope requested)
- auth.exchange_code_for_session() - Finish the PKCE flow
- auth.get_user() - Get current user from JWT token
- auth.get_session() - Current session, including provider_token
- auth.refresh_session() - New access/refresh tokens
- auth.sign_out() - Logout users

provider_token is Google's access token. It is only present right after the
OAuth exchange (or a refresh that returns it) and is never stored server-side;
clients send it back in the X-Provider-Token header when exporting events.
"""
