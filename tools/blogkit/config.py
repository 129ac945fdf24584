#!/usr/bin/env python3
from __future__ import annotations

import os
import pathlib
import re

# ---------- Paths

# Site root: $BLOGKIT_ROOT, else the current working directory.
ROOT = pathlib.Path(os.environ.get("BLOGKIT_ROOT") or pathlib.Path.cwd()).resolve()
SITE_CONFIG_NAME = "site-config.yml"
CONTENT_BLOG = pathlib.PurePosixPath("content/blog")
CONTENT_ASSETS = pathlib.PurePosixPath("content/assets")
PUBLIC_DIR = pathlib.PurePosixPath("public")

# ---------- Components

HEADER_COMPONENT = "src/components/header.js"
FOOTER_COMPONENT = "src/components/footer.js"
BIO_COMPONENT = "src/components/bio.js"
BLOG_POST_TEMPLATE = "src/templates/blog-post.js"

# ---------- Build

POSTS_QUERY_LIMIT = 1000
AUTHOR_IMAGE_DIR = "author"
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif")
MARKDOWN_EXTENSIONS = (".md", ".markdown")
SLICES_MANIFEST = "_slices.yml"

# Namespace for deterministic node ids
NODE_NAMESPACE = "blogkit"

# Some shared regexes

SDL_TYPE = re.compile(
    r'type\s+(?P<name>\w+)(?:\s+implements\s+(?P<iface>[\w\s&]+?))?\s*'
    r'\{(?P<body>[^}]*)\}',
    re.MULTILINE,
)
SDL_FIELD = re.compile(
    r'^\s*(?P<name>\w+)\s*:\s*(?P<type>[\w\[\]!]+)(?P<directives>(?:\s*@\w+)*)\s*$',
    re.MULTILINE,
)
