"""
Image reference resolution.
"""

from orderdesk.core.images import image_url

BASE = "https://cdn.sanity.io/images/proj1/production"


def test_reference_string():
    assert image_url("image-abc123-800x600-png", "proj1", "production") == f"{BASE}/abc123-800x600.png"


def test_image_object_with_size():
    source = {"_type": "image", "asset": {"_ref": "image-abc123-800x600-jpg", "_type": "reference"}}
    assert image_url(source, "proj1", "production", 100, 100) == f"{BASE}/abc123-800x600.jpg?w=100&h=100"


def test_expanded_asset_url_passes_through():
    source = {"asset": {"url": "https://cdn.example.com/a.png"}}
    assert image_url(source, "proj1", "production") == "https://cdn.example.com/a.png"


def test_unparseable_sources_resolve_to_empty():
    assert image_url(None, "proj1", "production") == ""
    assert image_url("file-abc-pdf", "proj1", "production") == ""
    assert image_url({"asset": None}, "proj1", "production") == ""
