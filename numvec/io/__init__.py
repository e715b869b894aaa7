from ._yaml import dump_yaml, load_yaml
