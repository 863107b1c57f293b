"""Import URL extraction from module source text."""

import re
from typing import List, Sequence, Type

from registry.base import RegistryUrl, lookup

# Quoted http(s) URL; import/export specifiers and dynamic import() calls
# all put the module URL in a string literal.
_QUOTED_URL = re.compile(r"""(["'])(https?://[^"'\s]+)\1""")


def import_urls(content: str, registries: Sequence[Type[RegistryUrl]]) -> List[str]:
    """Return the distinct URLs in ``content`` that some registry recognizes.

    URLs keep the order of their first appearance in the file.
    """
    seen = set()
    urls = []
    for match in _QUOTED_URL.finditer(content):
        url = match.group(2)
        if url in seen:
            continue
        seen.add(url)
        if lookup(url, registries) is not None:
            urls.append(url)
    return urls
