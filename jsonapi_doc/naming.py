#
# Property name -> wire key translation
#
import re

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


class NamingStrategy:
    """
    Translates a property name to the key used in the serialized document
    """

    def translate_name(self, name: str) -> str:
        raise NotImplementedError

    def __call__(self, name: str) -> str:
        return self.translate_name(name)


class IdenticalNamingStrategy(NamingStrategy):
    def translate_name(self, name: str) -> str:
        return name


class SnakeCaseNamingStrategy(NamingStrategy):
    """
    firstName -> first_name
    """

    separator = "_"

    def translate_name(self, name: str) -> str:
        return _CAMEL_BOUNDARY.sub(r"\1" + self.separator + r"\2", name).replace("_", self.separator).lower()


class DasherizeNamingStrategy(SnakeCaseNamingStrategy):
    """
    firstName, first_name -> first-name
    """

    separator = "-"


class CamelCaseNamingStrategy(NamingStrategy):
    """
    first_name -> firstName
    """

    def translate_name(self, name: str) -> str:
        if not name:
            return name
        head, *tail = [part for part in re.split(r"[_\-]", name) if part] or [name]
        return head[0].lower() + head[1:] + "".join(part[0].upper() + part[1:] for part in tail)


NAMING_STRATEGIES = {
    "identical": IdenticalNamingStrategy,
    "snake_case": SnakeCaseNamingStrategy,
    "camel_case": CamelCaseNamingStrategy,
    "dasherize": DasherizeNamingStrategy,
}


def get_naming_strategy(name: str = "snake_case") -> NamingStrategy:
    """
    :param name: one of the NAMING_STRATEGIES keys
    :return: NamingStrategy instance
    """
    try:
        return NAMING_STRATEGIES[name or "snake_case"]()
    except KeyError:
        raise ValueError(f'Unknown naming strategy "{name}", use one of {", ".join(NAMING_STRATEGIES)}')
