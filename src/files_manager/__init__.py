"""Files Manager API: upload, list and inspect a user's files and folders."""
