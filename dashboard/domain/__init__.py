"""
dashboard.domain — Record models and enumerations for the six dashboard
collections.

Nothing in here should import from other dashboard sub-packages (only
stdlib / pydantic / bson).
"""
