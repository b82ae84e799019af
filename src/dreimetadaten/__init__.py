# ABOUTME: dreimetadaten - ordered metadata catalog for audio-play collections.
# ABOUTME: Top-level package; see metadata/ for the entity model and JSON codec.
