# LegalEase File - court document analysis and filing service
