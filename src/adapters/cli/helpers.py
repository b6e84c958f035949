"""
Utilitaires partages par les commandes CLI de SerieTrack.

- console : console Rich commune (progression, messages, tableaux)
- with_container : fournit un Container pret a l'emploi aux coroutines de commande
"""

from functools import wraps

from rich.console import Console

from src.container import Container

console = Console()


def with_container(requires_db: bool = True):
    """
    Passe un Container neuf en premier argument de la coroutine decoree.

    La base de suivi est initialisee (tables creees) avant l'appel,
    sauf avec requires_db=False.

    Exemple:
        @with_container()
        async def _export_async(container, full, auto):
            plan = container.destination_plan()
    """
    def decorator(command):
        @wraps(command)
        async def run_with_container(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return await command(container, *args, **kwargs)
        return run_with_container
    return decorator
