"""Application layer.

The :class:`~afas_update.application.update_object.UpdateObject` facade and
the use cases that drive the domain services and infrastructure adapters.
"""
