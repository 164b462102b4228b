"""Common literal values used across pagecraft.

These constants keep default paths, CDN sources, and layout names centralized
so the loader, composer, builder, and tests import the same values without
drifting. Intended for internal use within the pagecraft package.

Examples
--------
>>> from pagecraft import _constants
>>> _constants.DEFAULT_FEED_PATH
'/feed.xml'
>>> _constants.POST_LAYOUT
'post'
"""

DEFAULT_FEED_PATH = "/feed.xml"
DEFAULT_ENCODING = "utf-8"
DEFAULT_LANG = "en"
DEFAULT_LAYOUT = "page"
POST_LAYOUT = "post"

MATHJAX_SRC = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"
MERMAID_SRC = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js"
DISQUS_EMBED_TEMPLATE = "https://{shortname}.disqus.com/embed.js"
ISSO_EMBED_PATH = "/js/embed.min.js"

SYNTAX_STYLESHEET = "/assets/css/syntax.css"
SITEMAP_FILENAME = "sitemap.xml"
FRONT_MATTER_DELIMITER = "---"
