# Supabase Auth
# This module uses Supabase's built-in authentication system.
# The only application table tied to sign-up is `profiles` (see modules/profiles/models.py).

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (profile row is created right after)
- auth.sign_in_with_password() - Authenticate users
- auth.sign_in_with_oauth() - Federated sign-in (returns the provider URL)
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

User metadata (name) is stored in user_metadata during registration.
"""
