from django.contrib.auth.forms import UserCreationForm, UserChangeForm
from .models import AdminAccount


class AdminAccountCreationForm(UserCreationForm):
    class Meta:
        model = AdminAccount
        fields = ('email', 'name', 'role')


class AdminAccountChangeForm(UserChangeForm):
    class Meta:
        model = AdminAccount
        fields = ('email', 'name', 'role', 'is_active', 'is_staff', 'is_superuser', 'created_by')
