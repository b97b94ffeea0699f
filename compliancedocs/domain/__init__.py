"""Domain layer: enums and business-rule exceptions (no framework imports)."""
