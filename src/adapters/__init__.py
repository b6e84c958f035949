"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- cli/ : Interface ligne de commande (Typer + Rich)
- file_system.py : Destinations d'export (chemin fixe, fichier choisi)

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
Cela permet de changer les implémentations sans affecter la logique métier.
"""

from src.adapters.file_system import FixedPathDestination, HandleDestination

__all__ = [
    "FixedPathDestination",
    "HandleDestination",
]
