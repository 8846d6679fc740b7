"""
URL patterns para o domínio de Pessoas.

Montado em /v1/person/ (ver src/config/urls.py). Os nomes das
rotas seguem os usados pelos clientes existentes.
"""

from django.urls import path

from . import api_views

app_name = 'persons'

urlpatterns = [
    # Cadastro
    path('register', api_views.RegisterPersonAPIView.as_view(), name='register'),

    # Listagens
    path('listAllPatient', api_views.ListPatientsAPIView.as_view(), name='list_patients'),
    path('listAllTherapist', api_views.ListTherapistsAPIView.as_view(), name='list_therapists'),
    path(
        'findPatientsByTherapist/<str:pk>',
        api_views.PatientsByTherapistAPIView.as_view(),
        name='patients_by_therapist',
    ),

    # Consultas
    path('findById/<str:pk>', api_views.PersonDetailAPIView.as_view(), name='detail'),
    path('findbycpf/<str:cpf>', api_views.PersonByCpfAPIView.as_view(), name='by_cpf'),

    # Alterações
    path('updatePerson/<str:pk>', api_views.UpdatePersonAPIView.as_view(), name='update'),
    path('updatePassword/<str:cpf>', api_views.UpdatePasswordAPIView.as_view(), name='update_password'),
    path('forgotPassword/<str:cpf>', api_views.ForgotPasswordAPIView.as_view(), name='forgot_password'),
    path('delete/<str:pk>', api_views.DeletePersonAPIView.as_view(), name='delete'),
    path('reactivatePerson/<str:pk>', api_views.ReactivatePersonAPIView.as_view(), name='reactivate'),

    # Autenticação
    path('login', api_views.LoginAPIView.as_view(), name='login'),
]
