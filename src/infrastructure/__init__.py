"""
Couche infrastructure de SerieTrack.

- persistence/ : base de suivi SQLite avec SQLModel (tables, source de donnees
  de l'export, stockage des preferences)
"""
