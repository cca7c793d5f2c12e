"""Build step extending build variables from YAML configuration files.

The `yaml_variables` package reads a YAML file, locates a nested mapping
by a dot-separated location, and contributes the mapping's string
entries as environment variables to the following build steps.

Key features:
- strict, mapping-only resolution of dot-separated map locations;
- deterministic export of string entries only;
- `$NAME` / `${NAME}` expansion of the configured file path;
- host-neutral build, build log, and environment contribution interfaces,
  with an in-process build for local use.
"""
