"""Sources: persisted marker and value files."""
