"""Chat reply services sharing one interface."""