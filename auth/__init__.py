"""
auth — User authentication module.

Provides:
  • Password hashing (unsalted SHA-256)
  • Signup / login / logout / whoami service
  • ``AuthGuard`` — bearer session → user_id, evicting dangling sessions
"""
