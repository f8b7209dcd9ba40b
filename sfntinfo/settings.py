"""Global settings for sfntinfo.

Set `STRICT` to `True` to turn the malformations we normally tolerate
(duplicate table tags, unterminated cmap segments, directory entries
pointing outside the file) into exceptions.
"""

STRICT = False
