"""NutriLens - authentication service for the NutriLens mobile app.

Handles signup, login, token refresh and logout with stateless access
tokens and revocable, server-tracked refresh tokens.
"""

__version__ = "0.1.0"
