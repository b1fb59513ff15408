"""Blog post revision store: front matter, near-duplicate detection, canonical revisions."""
