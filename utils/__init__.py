"""utils — shared pydantic schemas."""
