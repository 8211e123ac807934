"""Full-screen programs run by the CLI."""
