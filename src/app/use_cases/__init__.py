"""
Use Cases

Organized into domain folders:
- documents/: Upload, listing, metadata, download, deletion
- sharing/: Invitations and role mutation
- links/: Shareable links and link-granted access
- annotations/: Versioned annotation snapshot
- identities/: Identity registration

Import from subdirectories.
"""
