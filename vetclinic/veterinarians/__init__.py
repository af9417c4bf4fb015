"""
Veterinarian profiles.
"""
