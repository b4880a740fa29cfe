#!/usr/bin/env python3
"""Print an Argon2 hash to use as STAFF_PASSWORD."""
import sys

from sanctuary.core.security import get_password_hash

if len(sys.argv) != 2:
    print("Usage: python hash_password.py 'your-password-here'")
    sys.exit(1)

password = sys.argv[1]

if len(password) < 8:
    print("❌ Error: Staff password must be at least 8 characters long")
    sys.exit(1)

print("✅ Password hash generated!")
print()
print("Add this to your .env file:")
print("-" * 80)
print(f"STAFF_PASSWORD={get_password_hash(password)}")
print("-" * 80)
