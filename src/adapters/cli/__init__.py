"""Interface ligne de commande SerieTrack (Typer + Rich)."""
