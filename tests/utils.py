from config_mapper import ConfigStruct, attribute, component, component_dict


class Position:
    """Plain object with integer-coercing writers."""

    def __init__(self):
        self._x = None
        self._y = None

    @property
    def x(self):
        return self._x

    @x.setter
    def x(self, arg):
        self._x = int(arg)

    @property
    def y(self):
        return self._y

    @y.setter
    def y(self, arg):
        self._y = int(arg)


class State:
    """Read-only nested component plus a plain writable attribute."""

    orientation = None

    def __init__(self):
        self._position = Position()

    @property
    def position(self):
        return self._position


class NamedPositions:
    """Read-only collection that creates Positions on access."""

    def __init__(self):
        self._positions_by_name = {}

    def __getitem__(self, name):
        if name not in self._positions_by_name:
            self._positions_by_name[name] = Position()
        return self._positions_by_name[name]

    def __iter__(self):
        return iter(self._positions_by_name.items())


class Thing:
    def __init__(self):
        self.foo = None
        self.bar = None


class Service(ConfigStruct):
    image = attribute(description="container image")
    port = attribute(int, default=80)


class AppConfig(ConfigStruct):
    name = attribute(description="application name")
    debug = attribute(bool, default=False)
    position = component({"x": attribute(int), "y": attribute(int, default=0)})
    services = component_dict(Service)
