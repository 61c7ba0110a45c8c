import logging
import sys

from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QFormLayout,
    QMainWindow,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from pyairtimeqt import (
    REGIONS,
    AirtimeGraphWidget,
    CodingRate,
    GraphState,
    RadioMode,
    get_region,
)

SUB_GHZ_RATES = [CodingRate.CR_4_5, CodingRate.CR_4_6, CodingRate.CR_4_7, CodingRate.CR_4_8]
ISM_2G4_RATES = SUB_GHZ_RATES + [
    CodingRate.CR_4_5_LI,
    CodingRate.CR_4_6_LI,
    CodingRate.CR_4_8_LI,
]


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")
    app = QApplication(sys.argv)

    win = QMainWindow()
    win.setWindowTitle("LoRa airtime")
    central = QWidget()
    layout = QVBoxLayout(central)

    form = QFormLayout()
    region_combo = QComboBox()
    region_combo.addItems(list(REGIONS))
    coding_rate_combo = QComboBox()
    packet_size = QSpinBox()
    form.addRow("Region:", region_combo)
    form.addRow("Coding rate:", coding_rate_combo)
    form.addRow("MACPayload size:", packet_size)
    layout.addLayout(form)

    state = GraphState()
    graph = AirtimeGraphWidget(state)
    layout.addWidget(graph)

    def on_region_changed(region_id):
        region = get_region(region_id)
        rates = ISM_2G4_RATES if region.radio_mode is RadioMode.LORA_2G4 else SUB_GHZ_RATES

        coding_rate_combo.blockSignals(True)
        coding_rate_combo.clear()
        for cr in rates:
            coding_rate_combo.addItem(cr.value, cr)
        coding_rate_combo.blockSignals(False)

        packet_size.setRange(0, region.max_mac_payload_size)
        state.configure(
            region=region,
            coding_rate=coding_rate_combo.currentData(),
            packet_size=packet_size.value(),
        )

    region_combo.currentTextChanged.connect(on_region_changed)
    coding_rate_combo.currentIndexChanged.connect(
        lambda _idx: state.set_coding_rate(coding_rate_combo.currentData())
    )
    packet_size.valueChanged.connect(state.set_packet_size)

    on_region_changed(region_combo.currentText())

    win.setCentralWidget(central)
    win.resize(970, 600)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
