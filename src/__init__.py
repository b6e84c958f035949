"""
SerieTrack - Sauvegarde des séries, listes et films suivis.

Ce package exporte la base de suivi en documents JSON autonomes,
un fichier par famille de données (séries, listes, films).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités d'export, ports, objets valeur)
- services/ : Couche application (pipeline d'export)
- adapters/ : Couche infrastructure (CLI, destinations fichiers)
- infrastructure/ : Persistance SQLModel (data source, préférences)
"""
