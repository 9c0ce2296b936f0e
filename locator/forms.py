from django import forms


class LocationSearchForm(forms.Form):
    address = forms.CharField(
        max_length=255, required=False, label="",
        widget=forms.TextInput(attrs={"placeholder": "address or zip code"}),
    )

    def __init__(self, *args, descriptor=None, **kwargs):
        super().__init__(*args, **kwargs)
        if descriptor is not None and descriptor.category_options:
            choices = [("", "Select Category")] + [(name, name) for name in dict.fromkeys(descriptor.category_options)]
            self.fields["category"] = forms.ChoiceField(choices=choices, required=False, label="")
