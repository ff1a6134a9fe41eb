"""Bundled data files for dirscan."""
