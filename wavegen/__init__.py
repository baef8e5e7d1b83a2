"""wavegen - GTKWave display scripts from annotated VHDL.

Signals declared in a testbench architecture are shown in declaration order.
Comments attached to the declarations steer the result::

    -- color green, format hex
    signal addr, data : std_logic_vector(31 downto 0);
    signal busy : std_logic;  -- omit
    -- add signal dut.state
"""

__version__ = "0.1.0"
