"""
Taxonomie des erreurs du pipeline d'export.

- FileAccessError : destination inutilisable (volume absent, repertoire non creable,
  fichier de sauvegarde non choisi ou revoque, erreur d'E/S en cours d'ecriture).
  Recuperable en choisissant une nouvelle destination.
- MalformedDataError : une valeur ne peut pas etre serialisee en JSON
  (ex: flottant non fini).
- DataSourceError : echec d'une requete sur la base de suivi.
"""


class ExportError(Exception):
    """Erreur de base du pipeline d'export."""


class FileAccessError(ExportError):
    """La destination ne peut pas etre ouverte ou ecrite."""


class MalformedDataError(ExportError):
    """Une valeur ne peut pas etre serialisee."""


class DataSourceError(ExportError):
    """Une requete sur la source de donnees a echoue."""
