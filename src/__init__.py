"""Label Scan OCR - разбор транспортных этикеток по штрихкодам и OCR."""
