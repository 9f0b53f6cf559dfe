from .factory import BindingFactory, render_channel_template

__all__ = ["BindingFactory", "render_channel_template"]
