"""HTTP surface: paste page, JSON endpoints and static assets."""
