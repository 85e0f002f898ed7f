"""Gateway services: device API, registries, parsing and the command pipeline."""
