from django.urls import path
from . import views

app_name = 'ledger'

urlpatterns = [
    # POST /api/buy     - {userId, item: {id, price, name, image, bundleIds}}
    # POST /api/refund  - {userId, itemId, amount}
    path('buy', views.buy, name='buy'),
    path('refund', views.refund, name='refund'),
]
