"""Domain layer - spot request records, decisions and ports."""
