"""Fiery Dragons board engine: volcano ring, dragon cursors and chit card rules."""
