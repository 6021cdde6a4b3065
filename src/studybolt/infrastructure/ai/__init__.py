"""AI infrastructure: the hosted study-assistant agent.

Import ``client``/``factory`` directly; this package stays import-light so
prompt modules can be loaded from the domain layer.
"""
