# ORM models
