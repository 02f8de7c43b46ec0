"""
Shared fixtures for gxf2chrom tests.
"""

import pytest


def gtf_line(chrom, feature, start, end, strand, attributes, source="HAVANA"):
    return "\t".join([chrom, source, feature, str(start), str(end), ".", strand, ".", attributes])


GTF_TEXT = "\n".join(
    [
        "##description: evidence-based annotation of the human genome",
        "##provider: GENCODE",
        gtf_line("chr1", "gene", 65419, 71585, "+", 'gene_id "ENSG00000186092.7"; gene_name "OR4F5";'),
        gtf_line(
            "chr1",
            "CDS",
            65565,
            65573,
            "+",
            'gene_id "ENSG00000186092.7"; transcript_id "ENST00000641515.2"; protein_id "ENSP00000493376.2"; tag "basic"; tag "CCDS";',
        ),
        gtf_line(
            "chr1",
            "exon",
            65419,
            65433,
            "+",
            'gene_id "ENSG00000186092.7"; transcript_id "ENST00000641515.2"; exon_number 1;',
        ),
        gtf_line(
            "chr1",
            "CDS",
            69037,
            70008,
            "+",
            'gene_id "ENSG00000186092.7"; transcript_id "ENST00000641515.2"; protein_id "ENSP00000493376.2";',
        ),
        "# interleaved comment",
        gtf_line(
            "chr1",
            "CDS",
            450740,
            451678,
            "-",
            'gene_id "ENSG00000284733.2"; protein_id "ENSP00000426426.1";',
        ),
        gtf_line("chr1", "start_codon", 65565, 65567, "+", 'gene_id "ENSG00000186092.7"; protein_id "ENSP00000493376.2";'),
        "",
    ]
)

GFF3_TEXT = "\n".join(
    [
        "##gff-version 3",
        gtf_line("chr2", "gene", 1000, 9000, "-", "ID=gene:G1;Name=G1"),
        gtf_line("chr2", "CDS", 1200, 1500, "-", "ID=CDS:P1;Parent=transcript:T1;protein_id=P1"),
        gtf_line("chr2", "CDS", 3000, 3300, "-", "ID=CDS:P1;Parent=transcript:T1;protein_id=P1"),
        gtf_line("chr2", "CDS", 8000, 8100, "-", 'ID=CDS:P2;Parent=transcript:T2;protein_id="P2"'),
        "",
    ]
)


@pytest.fixture
def gtf_text():
    return GTF_TEXT


@pytest.fixture
def gff3_text():
    return GFF3_TEXT


@pytest.fixture
def make_line():
    return gtf_line
