"""
Couche domaine (core).

Contient les entités d'export, ports (interfaces abstraites), et objets valeur.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités d'export (séries, saisons, épisodes, listes, films)
- ports/ : Interfaces abstraites (data source, préférences, destinations)
- value_objects/ : Objets valeur immutables (famille, mode, résultat, progression)
"""
