"""Directory-tree templates.

Loads a template directory, binds its context to resolvers and renders the
tree into a new project directory.

Quick usage::

    from skel.template import get

    template = get("~/templates/python-lib")
    template.use_default_values()
    template.execute("/tmp/my-lib")
"""

from skel.template.binding import bind_resolvers
from skel.template.context import Context, Metadata, load_context, load_metadata
from skel.template.handle import Template, get
from skel.template.materializer import TreeMaterializer
from skel.template.renderer import TemplateRenderer

__all__ = [
    "Context",
    "Metadata",
    "Template",
    "TemplateRenderer",
    "TreeMaterializer",
    "bind_resolvers",
    "get",
    "load_context",
    "load_metadata",
]
