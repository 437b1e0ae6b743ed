# novacheckout/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    name = 'novacheckout.core'
    label = 'core'
    verbose_name = 'Camada de Entidades e Lógica (Core)'
    # Sem modelos: registrado apenas pelos management commands.
    default_auto_field = 'django.db.models.BigAutoField'
