from .address_yaml_generator import AddressYamlGenerator

__all__ = ["AddressYamlGenerator"]
