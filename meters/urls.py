from django.urls import path
from . import views

urlpatterns = [

#     ── Session ───────────────────────────────────────────
    path('login/',                          views.login,                  name='login'),

#     ── Customers ─────────────────────────────────────────
    path('customers/',                      views.customer_list,          name='customer-list'),

#     ── Meter Readings ────────────────────────────────────
    path('readings/',                       views.reading_create,         name='reading-create'),
    path('readings/<str:meter_number>/',    views.reading_list,           name='reading-list'),

#     ── Staff Profile ─────────────────────────────────────
    path('profile/<int:pk>/',               views.profile,                name='profile'),
]
