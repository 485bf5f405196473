"""Names of Direct3D result codes."""

from __future__ import annotations

_FACILITY_D3D = 0x88760000


def _d3derr(code: int) -> int:
    return _FACILITY_D3D | code


D3D_ERRORS: dict[int, str] = {
    0: "D3D_OK",
    _d3derr(2072): "D3DERR_WRONGTEXTUREFORMAT",
    _d3derr(2073): "D3DERR_UNSUPPORTEDCOLOROPERATION",
    _d3derr(2074): "D3DERR_UNSUPPORTEDCOLORARG",
    _d3derr(2075): "D3DERR_UNSUPPORTEDALPHAOPERATION",
    _d3derr(2076): "D3DERR_UNSUPPORTEDALPHAARG",
    _d3derr(2077): "D3DERR_TOOMANYOPERATIONS",
    _d3derr(2078): "D3DERR_CONFLICTINGTEXTUREFILTER",
    _d3derr(2079): "D3DERR_UNSUPPORTEDFACTORVALUE",
    _d3derr(2081): "D3DERR_CONFLICTINGRENDERSTATE",
    _d3derr(2082): "D3DERR_UNSUPPORTEDTEXTUREFILTER",
    _d3derr(2086): "D3DERR_CONFLICTINGTEXTUREPALETTE",
    _d3derr(2087): "D3DERR_DRIVERINTERNALERROR",
    _d3derr(2150): "D3DERR_NOTFOUND",
    _d3derr(2151): "D3DERR_MOREDATA",
    _d3derr(2152): "D3DERR_DEVICELOST",
    _d3derr(2153): "D3DERR_DEVICENOTRESET",
    _d3derr(2154): "D3DERR_NOTAVAILABLE",
    _d3derr(380): "D3DERR_OUTOFVIDEOMEMORY",
    _d3derr(2155): "D3DERR_INVALIDDEVICE",
    _d3derr(2156): "D3DERR_INVALIDCALL",
    _d3derr(2157): "D3DERR_DRIVERINVALIDCALL",
    0x8007000E: "E_OUTOFMEMORY",
}


def d3d_error_str(hr: int) -> str:
    """Return the symbolic name of an HRESULT, or its hexadecimal value when unknown.

    Both signed and unsigned 32-bit forms of the code are accepted.
    """
    code = hr & 0xFFFFFFFF
    name = D3D_ERRORS.get(code)
    if name is not None:
        return name
    return f"0x{code:x}"