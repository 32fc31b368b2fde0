"""Application – stack catalogue, validation and archive delivery."""
