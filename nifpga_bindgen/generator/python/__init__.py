from .binding_generator import BindingGenerator, module_filename

__all__ = ["BindingGenerator", "module_filename"]
