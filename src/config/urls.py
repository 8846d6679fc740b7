"""
URL Configuration do serviço de Pessoas.

Estrutura:
- /admin/ - Django Admin
- /v1/person/ - API de Pessoas
- /health/ - Health check
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include


def health(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    # Django Admin
    path('admin/', admin.site.urls),

    # API de Pessoas
    path('v1/person/', include('src.adapters.django_app.persons.urls')),

    # Health check
    path('health/', health, name='health'),
]
