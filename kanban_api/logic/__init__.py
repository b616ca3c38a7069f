"""Domain logic: the rank ordering engine and SQL repositories."""
