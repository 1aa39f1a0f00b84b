"""Infrastructure layer - storage, remote sync and exports."""
