"""
auth — User authentication module.

Provides:
  • JWT creation & verification (PyJWT, HS256)
  • Password hashing (bcrypt)
  • ``AuthService`` — register / login
  • Register / Login API routes
  • ``get_current_claims`` FastAPI dependency
"""
