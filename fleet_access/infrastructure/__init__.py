"""Infrastructure layer: persistence (SQLAlchemy) and security (bcrypt, JWT)."""
