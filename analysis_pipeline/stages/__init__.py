"""Pipeline stages: the base classes plus product clearing and histogram building."""