from django.dispatch import Signal

# Sent after a search form descriptor is derived.
# kwargs: locator, descriptor. Receivers may append to descriptor.extra_fields.
search_form_described = Signal()

# Sent after the map widget options are built.
# kwargs: locator, settings, options. Receivers may update the options dict.
map_options_built = Signal()
