"""SmartQ: salon virtual-queue service (MQTT-based).

Customers join a salon's wait-list, owners move entries through
waiting -> in-progress -> completed (or no-show), and every change of a
salon's queue is pushed to the customers subscribed to that salon.

Components:
- `SalonQueueManager` (pure business logic, in-memory store)
- `MqttSalonQueueService` (exposes the manager over MQTT request/response)
- customer and owner client CLIs

See `python -m smartq.app -h`.
"""
