"""Application services that orchestrate domain logic and persistence."""
