"""P69: token expansion for style sheets."""
