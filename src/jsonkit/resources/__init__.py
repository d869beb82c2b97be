"""Bundled JSON documents, loadable with ``load_from_resource``."""
