"""Protocol adapters and the registration table used by the metadata build."""
