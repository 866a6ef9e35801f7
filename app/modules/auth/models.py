# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

Registration also seeds a row in public.profiles (see app/modules/profiles/models.py)
so the wellness tables always have a profile to hang off.
Display name is stored in user_metadata.full_name.
"""
