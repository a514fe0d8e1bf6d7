"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt, salted, cost-factored)
  • Access token creation & verification (PyJWT, HS256)
  • ``AuthService`` — register / login / credential-aware update
  • Register / Login API routes
"""
