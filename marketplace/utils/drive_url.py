import re

DRIVE_FILE_PATTERN = re.compile(r'/file/d/([^/]+)')
DRIVE_THUMBNAIL_URL = 'https://drive.google.com/thumbnail?id={file_id}&sz=w1000'


def convert_google_drive_url(url):
    """
    Turn a Google Drive share link (``.../file/d/<id>/view``) into a direct
    thumbnail link that can be used as an ``<img>`` source.

    Anything that does not look like a Drive file link is returned unchanged.
    """
    if not url:
        return url

    match = DRIVE_FILE_PATTERN.search(url)
    if match and match.group(1):
        return DRIVE_THUMBNAIL_URL.format(file_id=match.group(1))
    return url
