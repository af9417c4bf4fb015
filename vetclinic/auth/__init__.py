"""
Authentication module for the veterinary clinic.

This module provides:
- Registration with email confirmation
- Login with JWT session tokens
- Password recovery with single-use tokens
- The dependency that resolves the authenticated veterinarian
"""
