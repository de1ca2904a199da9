"""
Image URLs
==========

Resolves content store image references to CDN URLs.
"""

from urllib.parse import urlencode

CDN_BASE = "https://cdn.sanity.io/images"


def _asset_ref(source):
    """Pull the asset reference (or a ready URL) out of an image source."""
    if not source:
        return ''
    if isinstance(source, str):
        return source
    if isinstance(source, dict):
        asset = source.get('asset', source)
        if isinstance(asset, dict):
            return asset.get('url') or asset.get('_ref') or asset.get('_id') or ''
        if isinstance(asset, str):
            return asset
    return ''


def image_url(source, project_id, dataset, width=None, height=None):
    """Resolve an image reference to a renderable URL.

    Args:
        source: Asset reference string ("image-<id>-<W>x<H>-<fmt>"), image
            object ({'asset': {'_ref': ...}}), expanded asset or absolute URL.
        project_id: Content store project id.
        dataset: Content store dataset name.
        width: Optional target width in pixels.
        height: Optional target height in pixels.

    Returns:
        CDN URL, or '' when the source cannot be parsed.
    """
    ref = _asset_ref(source)
    if not ref:
        return ''

    if ref.startswith(('http://', 'https://')):
        url = ref
    else:
        parts = ref.split('-')
        if len(parts) < 4 or parts[0] != 'image':
            return ''
        fmt = parts[-1]
        dimensions = parts[-2]
        asset_id = '-'.join(parts[1:-2])
        if 'x' not in dimensions or not asset_id or not fmt:
            return ''
        url = f"{CDN_BASE}/{project_id}/{dataset}/{asset_id}-{dimensions}.{fmt}"

    query = {}
    if width:
        query['w'] = int(width)
    if height:
        query['h'] = int(height)
    if query:
        separator = '&' if '?' in url else '?'
        url = f"{url}{separator}{urlencode(query)}"
    return url
