"""Image upload module for the site admin service.

Handles the cover image and event image uploads. Incoming filenames are
untrusted: they are resolved into safe names (see ``naming``) and written
flat into the storage root (see ``storage``).

Supported file types:
- Cover: anything; stored as fmi.<ext>
- Event images: JPEG and PNG only
"""
