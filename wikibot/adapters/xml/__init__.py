from wikibot.adapters.xml.etree_parser import ElementNode, EtreeParser

__all__ = ["ElementNode", "EtreeParser"]
