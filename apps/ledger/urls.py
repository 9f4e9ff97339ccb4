from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'ledger'

router = SimpleRouter()
router.register(r'deposits', views.DepositViewSet, basename='deposit')
router.register(r'expenses', views.ExpenseViewSet, basename='expense')
router.register(r'shared-expenses', views.SharedExpenseViewSet, basename='shared-expense')
router.register(r'meal-counts', views.MealCountViewSet, basename='meal-count')
router.register(r'debt-requests', views.DebtRequestViewSet, basename='debt-request')
router.register(r'debts', views.DebtViewSet, basename='debt')

urlpatterns = [
    # All routes are nested under /api/messes/{mess_id}/ledger/
    # GET    summary/                            - Household and member balances
    # GET    meal-rate/?start_date=&end_date=    - Meal rate for a date range
    # GET    debt-requests/{id}/                 - Single debt request
    # POST   debt-requests/{id}/accept/          - Payer accepts (settles)
    # POST   debt-requests/{id}/reject/          - Payer denies
    path('summary/', views.summary, name='summary'),
    path('meal-rate/', views.meal_rate, name='meal-rate'),

    path('', include(router.urls)),
]
