"""
Veterinary clinic backend.

Veterinarian accounts with email confirmation, password recovery and JWT
sessions, and the patient records each veterinarian manages.
"""
