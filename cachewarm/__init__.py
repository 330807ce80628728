"""Client that asks a mounted file system to pre-warm its cache for a list of paths."""
