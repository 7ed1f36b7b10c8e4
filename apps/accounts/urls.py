from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register', views.register, name='register'),
    path('login', views.login, name='login'),

    # User lookup
    path('me', views.get_current_user, name='current-user'),
    path('user/<str:email>', views.user_by_email, name='user-by-email'),
    path('users', views.user_list, name='user-list'),
]
