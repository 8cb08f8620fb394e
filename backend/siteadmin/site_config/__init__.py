"""Site content configuration module.

The admin UI saves the whole site content document in one request; it is
written verbatim (pretty-printed) to ``assets/site-content.json`` under the
storage root, replacing the previous version.
"""
