from django.apps import AppConfig


class PostsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'posts'

    def ready(self):
        """Register the core parse hooks and signal handlers when app is ready."""
        from posts.parsing import register_hooks

        register_hooks()
        import posts.signals  # noqa: F401 - Register cache invalidation handlers
