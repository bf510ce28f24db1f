"""PocketBase data access for LifeLine."""
