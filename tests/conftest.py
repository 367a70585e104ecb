"""Shared fixtures for SLA parser tests."""

from typing import Any, Callable, Optional

import pytest

from sla_parser.parsing import ParseContext
from sla_parser.shared.config import ParserConfig

MINIMAL_SLA = """\
<sleigh bigendian="n" align="1" uniqbase="0x0">
  <spaces defaultspace="ram">
    <space_base name="ram" index="1" bigendian="n" delay="1" size="4" physical="y"/>
  </spaces>
  <symbol_table scopesize="1" symbolsize="0">
    <scope id="0x0" parent="0x0"/>
  </symbol_table>
</sleigh>
"""

FULL_SLA = """\
<?xml version="1.0" encoding="UTF-8"?>
<sleigh version="3" bigendian="false" align="1" uniqbase="0x10000000" maxdelay="0x1" uniqmask="0xfff" numsections="0x2">
<sourcefiles>
<sourcefile name="arm&amp;thumb.sinc" index="0"/>
<sourcefile name="arm.slaspec" index="1"/>
</sourcefiles>
<spaces defaultspace="ram">
<space_base name="ram" index="1" bigendian="false" delay="1" size="4" physical="true"/>
<space_unique name="unique" index="2" bigendian="false" delay="0" deadcodedelay="0" size="4" physical="true"/>
<space_other name="OTHER" index="3" bigendian="false" delay="0" size="8" physical="true"/>
<space_overlay name="ovl" index="4" bigendian="false" delay="1" size="4" wordsize="2" physical="false"/>
<space name="register" index="5" bigendian="false" delay="0" size="4" physical="true"/>
</spaces>
<symbol_table scopesize="2" symbolsize="15">
<scope id="0x0" parent="0x0"/>
<scope id="0x1" parent="0x0"/>
<userop_head name="syscall" id="0x0" scope="0x0"/>
<epsilon_sym_head name="epsilon" id="0x1" scope="0x0"/>
<value_sym_head name="imm8" id="0x2" scope="0x0"/>
<valuemap_sym_head name="vmap" id="0x3" scope="0x0"/>
<name_sym_head name="cond" id="0x4" scope="0x0"/>
<varnode_sym_head name="r0" id="0x5" scope="0x0"/>
<context_sym_head name="TMode" id="0x6" scope="0x0"/>
<varlist_sym_head name="reg" id="0x7" scope="0x0"/>
<operand_sym_head name="op0" id="0x8" scope="0x1"/>
<start_sym_head name="inst_start" id="0x9" scope="0x0"/>
<end_sym_head name="inst_next" id="0xa" scope="0x0"/>
<next2_sym_head name="inst_next2" id="0xb" scope="0x0"/>
<flowdest_sym_head name="inst_dest" id="0xc" scope="0x0"/>
<flowref_sym_head name="inst_ref" id="0xd" scope="0x0"/>
<subtable_sym_head name="instruction" id="0xe" scope="0x0"/>
<userop name="syscall" id="0x0" scope="0x0" index="0"/>
<epsilon_sym name="epsilon" id="0x1" scope="0x0"/>
<value_sym name="imm8" id="0x2" scope="0x0">
<tokenfield bigendian="false" signbit="false" bitstart="0" bitend="7" bytestart="0" byteend="0" shift="0"/>
</value_sym>
<valuemap_sym name="vmap" id="0x3" scope="0x0">
<tokenfield bigendian="false" signbit="false" bitstart="0" bitend="1" bytestart="0" byteend="0" shift="0"/>
<valuetab val="1"/>
<valuetab val="-2"/>
</valuemap_sym>
<name_sym name="cond" id="0x4" scope="0x0">
<tokenfield bigendian="false" signbit="false" bitstart="28" bitend="31" bytestart="3" byteend="3" shift="4"/>
<nametab name="eq"/>
<nametab/>
<nametab name="&lt;lt&gt;"/>
</name_sym>
<varnode_sym name="r0" id="0x5" scope="0x0" space="register" offset="0x20" size="4"></varnode_sym>
<context_sym name="TMode" id="0x6" scope="0x0" varnode="0x40" low="0" high="0" flow="true">
<contextfield signbit="false" startbit="0" endbit="0" startbyte="0" endbyte="0" shift="31"/>
</context_sym>
<varlist_sym name="reg" id="0x7" scope="0x0">
<tokenfield bigendian="false" signbit="false" bitstart="0" bitend="0" bytestart="0" byteend="0" shift="0"/>
<var id="0x5"/>
<null/>
</varlist_sym>
<operand_sym name="op0" id="0x8" scope="0x1" subsym="0x2" off="0" base="-1" minlen="1" index="0">
<operand_exp index="0" table="0xe" ct="0x0"/>
</operand_sym>
<start_sym name="inst_start" id="0x9" scope="0x0"/>
<end_sym name="inst_next" id="0xa" scope="0x0"/>
<next2_sym name="inst_next2" id="0xb" scope="0x0"/>
<flowdest_sym name="inst_dest" id="0xc" scope="0x0"/>
<flowref_sym name="inst_ref" id="0xd" scope="0x0"/>
<subtable_sym name="instruction" id="0xe" scope="0x0" numct="2">
<constructor parent="0xe" first="0" length="1" line="12:3">
<oper id="0x8"/>
<print piece="mov"/>
<print piece=" "/>
<opprint id="0"/>
<context_op i="0" shift="31" mask="0x80000000">
<intb val="1"/>
</context_op>
<commit id="0x6" num="0" mask="0x80000000" flow="false"/>
<construct_tpl delay="0" labels="0">
<null/>
<op_tpl code="COPY">
<varnode_tpl><const_tpl type="spaceid" name="register"/><const_tpl type="real" val="0x20"/><const_tpl type="real" val="0x4"/></varnode_tpl>
<varnode_tpl><const_tpl type="handle" val="0" s="space"/><const_tpl type="handle" val="0" s="offset"/><const_tpl type="handle" val="0" s="size"/></varnode_tpl>
</op_tpl>
</construct_tpl>
<construct_tpl section="1">
<null/>
</construct_tpl>
</constructor>
<constructor parent="0xe" first="0" length="1" line="20">
<print piece="nop"/>
</constructor>
<decision number="0" context="false" start="0" size="1">
<decision number="1" context="false" start="0" size="0">
<pair id="0">
<instruct_pat><pat_block offset="0" nonzero="1"><mask_word mask="0x1" val="0x0"/></pat_block></instruct_pat>
</pair>
</decision>
<decision number="2" context="false" start="0" size="0">
<pair id="1">
<combine_pat>
<context_pat><pat_block offset="0" nonzero="0"></pat_block></context_pat>
<instruct_pat><pat_block offset="0" nonzero="1"><mask_word mask="0x1" val="0x1"/></pat_block></instruct_pat>
</combine_pat>
</pair>
</decision>
</decision>
</subtable_sym>
</symbol_table>
</sleigh>
"""


@pytest.fixture
def minimal_sla() -> str:
    """Smallest well-formed document: one space, one scope, no symbols."""
    return MINIMAL_SLA


@pytest.fixture
def full_sla() -> str:
    """Document using every space variant, symbol kind and template form."""
    return FULL_SLA


@pytest.fixture
def parse_fragment() -> Callable[..., Any]:
    """Run a node parser on a standalone element and require nothing to follow it."""

    def _parse(
        parser_function: Callable[[ParseContext, Any], Any],
        text: str,
        config: Optional[ParserConfig] = None,
    ) -> Any:
        context = ParseContext.from_text(text, config)
        tag = context.read_tag()
        result = parser_function(context, tag)
        context.scanner.expect_end_of_input()
        return result

    return _parse
