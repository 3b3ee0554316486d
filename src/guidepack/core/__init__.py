"""Core library: configuration, document catalog, bundle resolution and composition."""
