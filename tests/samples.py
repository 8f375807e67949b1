"""HELM notations shared across tests."""

CYCLIC_PEPTIDE = "PEPTIDE1{A.A.C.G.K.[dK].C.H.A}$PEPTIDE1,PEPTIDE1,3:R3-7:R3$$$"
CYCLIC_PEPTIDE_V2 = "PEPTIDE1{A.A.C.G.[dK].E.C.H.A}$PEPTIDE1,PEPTIDE1,3:R3-7:R3$$$V2.0"
PEPTIDE_CHEM_CONJUGATE = "PEPTIDE1{A.G.G.G.[seC].C.K.K.K.K}|CHEM1{MCC}$PEPTIDE1,CHEM1,9:R3-1:R1$$$"
OLIGO_CHEM_CONJUGATE = (
    "RNA1{R(A)P.[mR](A)P}|CHEM1{[*]OCCOCCOCCO[*] |$_R1;;;;;;;;;;;_R3$|}"
    "$RNA1,CHEM1,6:R2-1:R1$$$"
)
UNKNOWN_MONOMER = "PEPTIDE1{A.A.C.G.[dK].[xyz].E.C.H.A}$$$$"
