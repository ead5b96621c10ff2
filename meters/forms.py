from django import forms
from django.contrib.auth.models import User

from .models import StaffProfile


# ──────────────────────────────────────────────────────────
#   FORM 1 — LoginForm
# ──────────────────────────────────────────────────────────
class LoginForm(forms.Form):
    username = forms.CharField(max_length=150)
    password = forms.CharField(max_length=128, strip=False)


# ──────────────────────────────────────────────────────────
#   FORM 2 — ReadingSubmissionForm
#   reading_value is validated by the billing service, not here
# ──────────────────────────────────────────────────────────
class ReadingSubmissionForm(forms.Form):
    meter_number = forms.CharField(max_length=50)
    remarks      = forms.CharField(required=False)
    staff_id     = forms.ModelChoiceField(queryset=User.objects.all(),
                       required=False)

    def staff_pk(self):
        staff = self.cleaned_data.get('staff_id')
        return staff.pk if staff else None


# ──────────────────────────────────────────────────────────
#   FORM 3 — ProfileForm
# ──────────────────────────────────────────────────────────
class ProfileForm(forms.ModelForm):
    class Meta:
        model  = StaffProfile
        fields = ['name', 'email', 'contact_number', 'address']

    @classmethod
    def for_update(cls, data, instance):
        """Bind ``data`` over the stored values so omitted fields are kept."""
        merged = {name: getattr(instance, name) for name in cls.Meta.fields}
        merged.update({name: data.get(name) for name in cls.Meta.fields if name in data})
        return cls(merged, instance=instance)
