"""
Couche services applicatifs (cas d'utilisation).

Les services orchestrent la logique du domaine pour réaliser les cas
d'utilisation de l'application.

- export/ : Pipeline d'export JSON de la base de suivi
"""
