from django.urls import path
from . import views

app_name = "placement"

urlpatterns = [
    # Petite sonde de santé (pratique pour Nginx / monitoring)
    path("sante", views.sante, name="sante"),

    # POST /placement/solve/start            → lance une résolution (tâche Celery)
    # GET  /placement/solve/status/<task_id> → statut/résultat de la résolution
    path("solve/start", views.solve_start, name="solve_start"),
    path("solve/status/<str:task_id>", views.solve_status, name="solve_status"),
    path("validate", views.valider_plan, name="validate"),
]
