"""
MkDocs plugin that builds the function catalog of a C library.

The catalog is assembled once per build in ``on_config`` so themes and
other plugins can read it, then written next to the generated site as
``metadata.json`` (plus an optional search index) in ``on_post_build``.
"""

from __future__ import annotations

import logging
import os

from mkdocs.config import config_options
from mkdocs.config.base import Config as MkDocsConfig
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin

from .catalog import BuildOptions, CatalogBuilder, CatalogError
from .discover import DEFAULT_LIBRARY_DIRS, read_version
from .manual import DEFAULT_MANUAL_DIRS
from .model import write_catalog
from .parser import DEFAULT_FUNCTION_PATTERN
from .search import write_search_index

log = logging.getLogger("mkdocs.plugins.libcatalog")


class LibcatalogConfig(MkDocsConfig):
    source_root = config_options.Type(str, default="")
    library_dirs = config_options.Type(list, default=list(DEFAULT_LIBRARY_DIRS))
    impl_extensions = config_options.Type(list, default=[".c"])
    decl_extensions = config_options.Type(list, default=[".h"])
    exclude_dirs = config_options.Type(list, default=[])
    manual_dirs = config_options.Type(list, default=list(DEFAULT_MANUAL_DIRS))
    function_pattern = config_options.Type(str, default=DEFAULT_FUNCTION_PATTERN)
    entry_point = config_options.Type(str, default="main")
    project_name = config_options.Type(str, default="libft")
    version = config_options.Type(str, default="1.0.0")
    version_file = config_options.Type(str, default="")
    description = config_options.Type(
        str, default="42 School C Library - Extended standard library functions"
    )
    author = config_options.Type(str, default="")
    catalog_file = config_options.Type(str, default="metadata.json")
    search_index = config_options.Type(bool, default=True)
    search_index_file = config_options.Type(str, default="search_index.json")


class LibcatalogPlugin(BasePlugin[LibcatalogConfig]):

    def __init__(self):
        super().__init__()
        self.catalog = None

    def _abs(self, path, config_dir):
        if os.path.isabs(path):
            return path
        return os.path.normpath(os.path.join(config_dir, path))

    def _build_options(self, config_dir):
        version = self.config["version"]
        vf = self.config.get("version_file", "")
        if vf:
            vf = self._abs(vf, config_dir)
            found = read_version(vf)
            if found:
                log.info("libcatalog: project version %s (from %s)", found, vf)
                version = found

        return BuildOptions(
            source_root=self._abs(self.config["source_root"] or ".", config_dir),
            library_dirs=list(self.config["library_dirs"]),
            impl_extensions=list(self.config["impl_extensions"]),
            decl_extensions=list(self.config["decl_extensions"]),
            exclude_dirs=list(self.config["exclude_dirs"]),
            manual_dirs=list(self.config["manual_dirs"]),
            function_pattern=self.config["function_pattern"],
            entry_point=self.config["entry_point"],
            name=self.config["project_name"],
            version=version,
            description=self.config["description"],
            author=self.config["author"],
        )

    # ── MkDocs lifecycle hooks ──

    def on_config(self, config, **kwargs):
        config_dir = os.path.dirname(config.get("config_file_path", "") or "") or os.getcwd()
        options = self._build_options(config_dir)
        try:
            self.catalog = CatalogBuilder(options).build()
        except CatalogError as exc:
            log.error("libcatalog: %s", exc)
            raise PluginError(str(exc)) from exc
        return config

    def on_post_build(self, *, config, **kwargs):
        if self.catalog is None:
            return
        site_dir = config["site_dir"]
        out = os.path.join(site_dir, self.config["catalog_file"])
        write_catalog(self.catalog, out)
        log.info("libcatalog: catalog written to %s", out)

        if self.config["search_index"]:
            write_search_index(
                self.catalog, os.path.join(site_dir, self.config["search_index_file"])
            )
