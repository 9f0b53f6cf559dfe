"""Reference protocol plugins: ``asyncscribe.contrib.kafka`` and ``asyncscribe.contrib.amqp``."""
